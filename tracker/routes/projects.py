"""
Project API routes. Creating a project is an admin action.
"""

import logging

from flask import Blueprint, g, jsonify

from tracker.auth import admin_required
from tracker.resources import get_resources
from tracker.schemas import parse_body, CreateProjectRequest

logger = logging.getLogger(__name__)

projects_bp = Blueprint('projects', __name__, url_prefix='/projects')


@projects_bp.route('', methods=['GET'])
def list_projects():
    projects = get_resources().projects.list_all()
    return jsonify({"status": "success", "projects": projects, "count": len(projects)})


@projects_bp.route('', methods=['POST'])
@admin_required
def create_project():
    body = parse_body(CreateProjectRequest)
    project = get_resources().projects.create(body.name, body.description)

    logger.info(f"Created project #{project['id']}: {project['name']} (by '{g.current_user}')")
    return jsonify({"status": "success", "project": project}), 201
