from __future__ import annotations

from typing import Iterable

from fcm_tester.schemas import CustomField, SendMessageRequest


DATA_ONLY = 'data-only'
NOTIFICATION_DATA = 'notification-data'


def _apply_custom_fields(section: dict[str, str], fields: Iterable[CustomField]) -> None:
    # Applied in order, so a later pair wins over an earlier one or a built-in field.
    for item in fields:
        if item.key and item.value:
            section[item.key] = item.value


def _base_fields(spec: SendMessageRequest) -> dict[str, str]:
    fields: dict[str, str] = {}
    if spec.include_title and spec.custom_title:
        fields['title'] = spec.custom_title
    if spec.include_body and spec.custom_body:
        fields['body'] = spec.custom_body
    return fields


def preview_message(spec: SendMessageRequest) -> dict[str, dict[str, str]]:
    """Build the message sections for ``spec`` without the destination token."""
    link = spec.custom_link if spec.include_link else ''
    image = spec.image_url if spec.include_image else ''

    if spec.message_type == DATA_ONLY:
        data = _base_fields(spec)
        if link:
            data['link'] = link
        if image:
            data['image'] = image
        _apply_custom_fields(data, spec.custom_data_fields)
        return {'data': data}

    notification = _base_fields(spec)
    if image:
        notification['image'] = image
    _apply_custom_fields(notification, spec.custom_notification_fields)
    # The client app reads the link from data; it must not render as part of the alert.
    notification.pop('link', None)

    data: dict[str, str] = {}
    if link:
        data['link'] = link
    _apply_custom_fields(data, spec.custom_data_fields)
    return {'notification': notification, 'data': data}


def build_message(spec: SendMessageRequest) -> dict[str, object]:
    return {'token': spec.token.strip(), **preview_message(spec)}
