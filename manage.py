"""Management script for database setup and maintenance tasks"""

from dotenv import load_dotenv

load_dotenv()

from flask.cli import FlaskGroup

from realty import create_app
from realty.catalogue import PROJECTS
from realty.extensions import db
from realty.schema_maintenance import add_missing_columns, contact_columns, missing_contact_columns
from realty.services.project_service import seed_projects

app = create_app()
cli = FlaskGroup(create_app=lambda: app)


@cli.command("init-db")
def init_db():
    """Create all database tables"""
    with app.app_context():
        db.create_all()
        print("✅ Database initialized successfully!")


@cli.command("seed-projects")
def seed_projects_command():
    """Load the reference project catalogue (skips slugs already stored)"""
    with app.app_context():
        added = seed_projects(PROJECTS)
        print(f"✅ {added} project(s) added, {len(PROJECTS) - added} already present.")


@cli.command("add-missing-columns")
def add_missing_columns_command():
    """Add optional and scheduling columns the contacts table is missing"""
    with app.app_context():
        added = add_missing_columns(db.engine)
        if added:
            print(f"✅ Added columns: {', '.join(added)}")
        else:
            print("✅ contacts table already has every column")


@cli.command("diagnose-db")
def diagnose_db():
    """Show the live contacts table layout and any missing columns"""
    with app.app_context():
        columns = contact_columns(db.engine)
        if columns is None:
            print("❌ contacts table does not exist. Run: python manage.py init-db")
            return

        print("🔍 contacts table columns:")
        for name in columns:
            print(f"  - {name}")

        missing = missing_contact_columns(db.engine)
        if missing:
            print(f"⚠️  Missing columns: {', '.join(missing)}")
            print("   Run: python manage.py add-missing-columns")
        else:
            print("✅ No missing columns")


if __name__ == "__main__":
    cli()
