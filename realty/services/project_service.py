import logging

from realty.extensions import db
from realty.models.project import Project

logger = logging.getLogger(__name__)


def list_projects():
    return Project.query.order_by(Project.id.asc()).all()


def get_project(project_id):
    return db.session.get(Project, project_id)


def get_project_by_slug(slug):
    return Project.query.filter_by(slug=slug).first()


def seed_projects(catalogue):
    """Insert catalogue entries whose slug is not stored yet. Returns the number added."""
    existing = {slug for (slug,) in db.session.query(Project.slug).all()}
    added = 0

    for entry in catalogue:
        if entry["slug"] in existing:
            continue
        db.session.add(Project(**entry))
        existing.add(entry["slug"])
        added += 1

    db.session.commit()
    logger.info("Project catalogue seeded", extra={"added": added})
    return added
