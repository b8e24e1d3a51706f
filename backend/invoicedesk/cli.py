# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/invoicedesk/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Idempotent bootstrap: creates missing tables and the default admin account.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# User inspection/bootstrap:
# - python -m flask users list
#   List all users with role and permissions.
# - python -m flask users create --username clerk --password "secret" --role operator
#   Create a user (prompts if options are omitted).
#
# Data:
# - python -m flask data backup --out ./invoice_backup.db
#   Copy the live database file.
# - python -m flask data export-invoices [--out invoices.csv]
#   Write every invoice as CSV (stdout when --out is omitted).

import click
from flask.cli import with_appcontext

from .services import auth_service, backup_service, schema_service
from .services.auth_service import UserError
from .validation import ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Create any missing table and seed the default admin account.

    Safe to re-run; existing tables and users are left untouched.
    """
    click.echo("START Initializing database...")
    result = schema_service.ensure_schema()

    if result["created_tables"]:
        click.echo(f"PASS Created tables: {', '.join(result['created_tables'])}")
    else:
        click.echo("PASS All tables already exist")

    if result["admin_seeded"]:
        click.echo(f"PASS Created user: {auth_service.DEFAULT_ADMIN_USERNAME}")
        click.echo("\nDefault Credentials (CHANGE IN PRODUCTION!):")
        click.echo(f"   {auth_service.DEFAULT_ADMIN_USERNAME} / {auth_service.DEFAULT_ADMIN_PASSWORD}")
    else:
        click.echo(f"WARN  User '{auth_service.DEFAULT_ADMIN_USERNAME}' already exists, skipping...")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables and recreating schema...")
    result = schema_service.reset_schema()
    click.echo(f"PASS Recreated {len(result['created_tables'])} tables")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create')
@click.option('--username', prompt=True, help='Username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--role', type=click.Choice(list(auth_service.ROLES)), default='operator', show_default=True)
@click.option('--permission', 'permissions', multiple=True, help='Permission (repeatable)')
@with_appcontext
def create_user_cli(username, password, role, permissions):
    """Create a new user."""
    try:
        user = auth_service.create_user({
            "username": username,
            "password": password,
            "role": role,
            "permissions": list(permissions),
        })
    except (ValidationError, UserError) as e:
        click.echo(f"FAIL Failed to create user '{username}': {e}")
        raise SystemExit(1)
    click.echo(f"PASS Created user: {user.username} (ID: {user.id}) with role '{user.role}'")


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their role and permissions."""
    users = auth_service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "=" * 60)
    click.echo(f"{'ID':<5} {'Username':<20} {'Role':<10} {'Permissions'}")
    click.echo("=" * 60)
    for user in users:
        perms = ", ".join(user["permissions"]) or "-"
        click.echo(f"{user['id']:<5} {user['username'] or '':<20} {user['role'] or '':<10} {perms}")
    click.echo("=" * 60 + "\n")


@click.group('data')
def data_group():
    """Backup and export commands."""


@data_group.command('backup')
@click.option('--out', 'out_path', required=True, type=click.Path(dir_okay=False), help='Destination file')
@with_appcontext
def backup_cli(out_path):
    """Copy the live database file to --out."""
    backup_service.backup_to(out_path)
    click.echo(f"PASS Backup written to {out_path}")


@data_group.command('export-invoices')
@click.option('--out', 'out_path', type=click.Path(dir_okay=False), help='Destination file (default: stdout)')
@with_appcontext
def export_invoices_cli(out_path):
    """Write all invoices as CSV."""
    body = backup_service.export_invoices_csv()
    if not out_path:
        click.echo(body, nl=False)
        return
    with open(out_path, "w", encoding="utf-8", newline="") as fh:
        fh.write(body)
    click.echo(f"PASS Exported invoices to {out_path}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(data_group)
