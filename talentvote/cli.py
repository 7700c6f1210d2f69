import click
from flask.cli import with_appcontext

from talentvote.errors import ValidationError
from talentvote.models.user import ROLE_ADMIN
from talentvote.services import users as user_service


@click.command("create-admin")
@click.argument("name")
@click.argument("email")
@click.argument("password")
@with_appcontext
def create_admin_command(name, email, password):
    """Create an administrator account (used to seed a fresh database)."""
    try:
        user = user_service.create_user(name, email, password, role=ROLE_ADMIN)
    except ValidationError as exc:
        for field, message in exc.fields.items():
            click.echo(f"{field}: {message}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(f"Admin {user.email} created (id {user.id}).")


def register_cli(app):
    app.cli.add_command(create_admin_command)
