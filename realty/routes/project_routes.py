import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from realty.services import project_service

logger = logging.getLogger(__name__)

bp = Blueprint('projects', __name__, url_prefix='/api')


def _database_error(e, action):
    logger.error(f"API Error - {action}", extra={"error": str(e)})
    if isinstance(e, OperationalError):
        return jsonify({
            'message': 'Database connection unavailable',
            'details': 'The project catalogue could not be reached. Please try again later.',
        }), 503
    return jsonify({'message': f'Error {action}'}), 500


@bp.route('/projects', methods=['GET'])
def list_projects():
    try:
        projects = project_service.list_projects()
    except SQLAlchemyError as e:
        return _database_error(e, 'fetching projects')

    return jsonify([project.to_dict() for project in projects]), 200


@bp.route('/projects/<project_id>', methods=['GET'])
def get_project(project_id):
    try:
        project_id = int(project_id)
    except ValueError:
        return jsonify({'message': 'Invalid project ID'}), 400

    try:
        project = project_service.get_project(project_id)
    except SQLAlchemyError as e:
        return _database_error(e, 'fetching project')

    if not project:
        return jsonify({'message': 'Project not found'}), 404

    return jsonify(project.to_dict()), 200


@bp.route('/project/<slug>', methods=['GET'])
def get_project_by_slug(slug):
    try:
        project = project_service.get_project_by_slug(slug)
    except SQLAlchemyError as e:
        return _database_error(e, 'fetching project')

    if not project:
        return jsonify({'message': 'Project not found'}), 404

    return jsonify(project.to_dict()), 200
