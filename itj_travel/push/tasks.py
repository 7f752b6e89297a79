import logging

from celery import shared_task

from itj_travel.push.services import group_payload
from itj_travel.push.services import panic_payload
from itj_travel.push.services import send_to_group

logger = logging.getLogger(__name__)


@shared_task(name="push.send_panic_push")
def send_panic_push(group_id: str, user_id: str, user_name: str, message: str) -> dict:
    """Notify everyone in the group except the user who raised the alert."""
    report = send_to_group(
        group_id,
        panic_payload(user_name, message),
        exclude_user_id=user_id,
    )
    return report.as_dict()


@shared_task(name="push.send_group_push")
def send_group_push(group_id: str, title: str, body: str) -> dict:
    return send_to_group(group_id, group_payload(title, body)).as_dict()


def queue_panic_push(group_id, user_id, user_name: str, message: str) -> None:
    """Hand the panic fan-out to a worker; a broker outage is logged, not raised."""
    try:
        send_panic_push.delay(str(group_id), str(user_id), user_name, message)
    except Exception:
        logger.exception("Could not queue panic push for group %s", group_id)
