"""Send a validated target price to the notification service."""

from __future__ import annotations

import logging

import requests

from ..backend.client import ApiError
from ..backend.notification_service import NotificationService
from ..common.models import CreateNotificationParams, UpdateNotificationParams
from .models import SubmitResult, TargetPriceState
from .reconciler import is_submittable, submission_error

logger = logging.getLogger(__name__)

MSG_CREATED = "监控已设置"
MSG_UPDATED = "监控设置已更新"
MSG_FAILED = "操作失败，请稍后重试"


class AlertSubmitter:
    """Create or update a price-drop alert from a reconciled state.

    Usage:
        submitter = AlertSubmitter(NotificationService(client))
        result = submitter.submit(state, activity_id="abc", is_edit=False)
        if not result.ok:
            show_toast(result.message)
    """

    def __init__(self, service: NotificationService) -> None:
        self._service = service

    def submit(
        self,
        state: TargetPriceState,
        activity_id: str,
        is_edit: bool = False,
    ) -> SubmitResult:
        """Submit the target; never raises for validation or network failures."""
        target = state.numeric_value
        if target is None or not is_submittable(state):
            error = submission_error(state)
            logger.debug("Not submitting %s: %s", activity_id, error.value)
            return SubmitResult(ok=False, message=error.message)

        try:
            if is_edit:
                self._service.update(
                    activity_id, UpdateNotificationParams(target_price=float(target))
                )
            else:
                self._service.create(
                    CreateNotificationParams(
                        activity_id=activity_id, target_price=float(target)
                    )
                )
        except (ApiError, requests.RequestException) as exc:
            logger.warning("Alert submission failed for %s: %s", activity_id, exc)
            return SubmitResult(ok=False, message=MSG_FAILED, target_price=target)

        return SubmitResult(
            ok=True,
            message=MSG_UPDATED if is_edit else MSG_CREATED,
            target_price=target,
        )
