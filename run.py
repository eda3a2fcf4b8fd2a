import os

import click

from app import create_app
from app.extensions import db
from app.cli.seed_commands import init_seed_commands

# FLASK_CONFIG picks the config class; 'default' is development.
config_name = os.getenv('FLASK_CONFIG') or 'default'
app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for `flask shell` command."""
    from app.models import Prompt, Tag, Contribution, Setting
    from app.settings import settings
    return {
        'db': db,
        'Prompt': Prompt,
        'Tag': Tag,
        'Contribution': Contribution,
        'Setting': Setting,
        'settings': settings,
    }


@app.cli.command('create-db')
@click.option('--drop', is_flag=True, default=False, help='Drop all tables first')
def create_db_command(drop):
    """Creates the database tables."""
    with app.app_context():
        if drop:
            db.drop_all()
        db.create_all()
    click.echo('Database tables created.')


init_seed_commands(app)

if __name__ == '__main__':
    # For production, use a proper WSGI server like Gunicorn or Waitress.
    click.echo("API docs available at: http://127.0.0.1:5000/api/docs/")
    app.run(threaded=True)
