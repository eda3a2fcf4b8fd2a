import click
import json
from app.seeds.seed_prompts import run as run_prompts


def init_seed_commands(app):
    """Register seed-related Flask CLI commands on the given app."""

    @app.cli.command('seed-prompts')
    @click.option('--lang', 'language', default=None, help='Collection language (zh or en); defaults to the LANGUAGE setting')
    @click.option('--file', 'prompts_file', default=None, type=click.Path(dir_okay=False), help='Parse this markdown file instead of the bundled collection')
    @click.option('--create-tables', is_flag=True, default=False, help='Create DB tables if missing')
    def seed_prompts(language, prompts_file, create_tables):
        """Import the public prompt collection as public prompts."""
        try:
            res = run_prompts(
                app=app,
                language=language,
                prompts_file=prompts_file,
                create_tables_if_missing=create_tables,
            )
        except FileNotFoundError as e:
            raise click.ClickException(str(e))
        click.echo(json.dumps(res, ensure_ascii=False, indent=2))
