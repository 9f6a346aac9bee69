"""
Developer API routes.
"""

import logging

from flask import Blueprint, jsonify

from tracker.auth import jwt_required
from tracker.resources import get_resources
from tracker.schemas import parse_body, CreateDeveloperRequest

logger = logging.getLogger(__name__)

developers_bp = Blueprint('developers', __name__, url_prefix='/developers')


@developers_bp.route('', methods=['GET'])
def list_developers():
    developers = get_resources().developers.list_all()
    return jsonify({"status": "success", "developers": developers, "count": len(developers)})


@developers_bp.route('', methods=['POST'])
@jwt_required
def create_developer():
    body = parse_body(CreateDeveloperRequest)
    developer = get_resources().developers.create(body.name)

    logger.info(f"Created developer #{developer['id']}: {developer['name']}")
    return jsonify({"status": "success", "developer": developer}), 201
