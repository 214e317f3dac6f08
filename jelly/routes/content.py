"""Site copy routes - owner overrides of the default page text."""
from flask import Blueprint, jsonify
from flask_babel import gettext as _

from jelly.errors import NotFound
from jelly.routes.auth import permission_required
from jelly.schemas import ContentUpdate, parse_body
from jelly.services.policy import Action
from jelly.services.site_content import SiteContent
from jelly.storage import get_storage

content_bp = Blueprint('content', __name__, url_prefix='/api/content')


def _site_content():
    return SiteContent(get_storage())


@content_bp.route('')
@permission_required(Action.EDIT_SITE_CONTENT)
def all_content():
    return jsonify([item.to_dict() for item in _site_content().get_all()])


@content_bp.route('/<section>')
@permission_required(Action.EDIT_SITE_CONTENT)
def section_content(section):
    return jsonify([item.to_dict() for item in _site_content().get_by_section(section)])


@content_bp.route('/<section>/<key>')
def content_item(section, key):
    item = _site_content().get(section, key)
    if item is None:
        raise NotFound(_('Content not found'))
    return jsonify(item.to_dict())


@content_bp.route('/<section>/<key>', methods=['PUT'])
@permission_required(Action.EDIT_SITE_CONTENT)
def update_content_item(section, key):
    data = parse_body(ContentUpdate)
    item = _site_content().upsert(section, key, data.value, data.type)
    return jsonify(item.to_dict())
