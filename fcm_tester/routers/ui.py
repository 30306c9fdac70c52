from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.templating import Jinja2Templates

from fcm_tester.config import settings


UI_DIR = Path(__file__).resolve().parents[1] / 'ui'

templates = Jinja2Templates(directory=str(UI_DIR / 'templates'))
router = APIRouter(tags=['UI'])
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormFeatures:
    image: bool = True
    field_toggles: bool = True
    custom_data_fields: bool = True
    custom_notification_fields: bool = True
    examples: bool = True


FORM_VARIANTS = {
    'full': FormFeatures(),
    'simple': FormFeatures(
        image=False,
        field_toggles=False,
        custom_data_fields=False,
        custom_notification_fields=False,
        examples=False,
    ),
}

FORM_DEFAULTS = {
    'customTitle': 'You have a new message',
    'customBody': '{{username}}, check it out',
    'customLink': 'https://example.com',
    'imageUrl': '',
}

DATA_FIELD_EXAMPLES = [
    {'key': 'userId', 'value': '12345'},
    {'key': 'action', 'value': 'view_profile'},
    {'key': 'category', 'value': 'notification'},
]

NOTIFICATION_FIELD_EXAMPLES = [
    {'key': 'sound', 'value': 'notification.wav'},
    {'key': 'badge', 'value': '5'},
    {'key': 'color', 'value': '#FF0000'},
]


def resolve_form_features(variant: str, overrides: str = '') -> FormFeatures:
    """Pick a variant preset, then apply ``overrides``.

    ``overrides`` is a comma list of feature names, each optionally prefixed
    with ``-`` to switch it off, e.g. ``"image,-examples"``.
    """
    features = FORM_VARIANTS.get((variant or 'full').strip().lower())
    if features is None:
        logger.warning('form_variant_unknown variant=%s', variant)
        features = FORM_VARIANTS['full']

    known = set(asdict(features))
    changes: dict[str, bool] = {}
    for raw in (overrides or '').split(','):
        name = raw.strip()
        if not name:
            continue
        enabled = not name.startswith('-')
        name = name.lstrip('-+').replace('-', '_')
        if name not in known:
            logger.warning('form_feature_unknown name=%s', name)
            continue
        changes[name] = enabled
    return replace(features, **changes)


@router.get('/')
def index(request: Request):
    features = resolve_form_features(settings.form_variant, settings.form_features)
    return templates.TemplateResponse(
        request,
        'index.html',
        {
            'app_name': settings.app_name,
            'features': features,
            'defaults': FORM_DEFAULTS,
            'data_examples': DATA_FIELD_EXAMPLES,
            'notification_examples': NOTIFICATION_FIELD_EXAMPLES,
        },
    )
