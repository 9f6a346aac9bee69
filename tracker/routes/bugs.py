"""
Bug report API routes.

Reads are public; every mutation requires a valid token.
"""

import logging

from flask import Blueprint, g, jsonify

from core.errors import NotFoundError
from tracker.auth import jwt_required
from tracker.resources import get_resources
from tracker.schemas import (
    parse_body,
    CreateBugRequest,
    UpdateBugRequest,
    AssignBugRequest,
)

logger = logging.getLogger(__name__)

bugs_bp = Blueprint('bugs', __name__, url_prefix='/bugs')


@bugs_bp.route('', methods=['GET'])
def list_bugs():
    """List all bugs, newest first."""
    bugs = get_resources().bugs.list_all()
    return jsonify({"status": "success", "bugs": bugs, "count": len(bugs)})


@bugs_bp.route('/<int:bug_id>', methods=['GET'])
def get_bug(bug_id):
    """Get a specific bug by ID."""
    bug = get_resources().bugs.get(bug_id)
    if bug is None:
        raise NotFoundError(f"Bug {bug_id} not found")
    return jsonify({"status": "success", "bug": bug})


@bugs_bp.route('/new', methods=['POST'])
@jwt_required
def create_bug():
    """File a new bug report."""
    body = parse_body(CreateBugRequest)
    fields = body.model_dump()
    if not fields["reported_by"]:
        fields["reported_by"] = g.current_user

    bug = get_resources().bugs.create(fields)

    logger.info(f"Created bug #{bug['id']}: {bug['title']}")
    return jsonify({
        "status": "success",
        "message": "Bug created successfully",
        "bug_id": bug["id"],
        "bug": bug,
    }), 201


@bugs_bp.route('/<int:bug_id>', methods=['PATCH'])
@jwt_required
def update_bug(bug_id):
    """Update fields of a bug."""
    body = parse_body(UpdateBugRequest)
    bug = get_resources().bugs.update(bug_id, body.model_dump(exclude_unset=True))

    logger.info(f"Updated bug #{bug_id}")
    return jsonify({"status": "success", "bug": bug})


@bugs_bp.route('/<int:bug_id>', methods=['DELETE'])
@jwt_required
def delete_bug(bug_id):
    """Delete a bug."""
    if not get_resources().bugs.delete(bug_id):
        raise NotFoundError(f"Bug {bug_id} not found")

    logger.info(f"Deleted bug #{bug_id} by '{g.current_user}'")
    return jsonify({"status": "success", "message": "Bug deleted successfully"})


@bugs_bp.route('/assign', methods=['POST'])
@jwt_required
def assign_bug():
    """Assign a bug to a developer (JSON or form body)."""
    body = parse_body(AssignBugRequest, allow_form=True)
    bug = get_resources().bugs.assign(body.bug_id, body.developer_id)

    logger.info(f"Bug #{body.bug_id} assigned to developer #{body.developer_id}")
    return jsonify({"status": "success", "message": "Bug assigned", "bug": bug})
