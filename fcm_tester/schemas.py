from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MessageType = Literal['data-only', 'notification-data']


class CustomField(BaseModel):
    key: str = ''
    value: str = ''


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    token: str = ''
    message_type: MessageType = 'data-only'
    custom_title: str = ''
    custom_body: str = ''
    custom_link: str = ''
    image_url: str = ''
    include_title: bool = True
    include_body: bool = True
    include_link: bool = True
    include_image: bool = True
    custom_data_fields: list[CustomField] = Field(default_factory=list)
    custom_notification_fields: list[CustomField] = Field(default_factory=list)


class SendMessageResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message_id: str
    sent_message: dict[str, object]


class PreviewResponse(BaseModel):
    message: dict[str, object]
