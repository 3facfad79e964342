"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .generate import generate_command
from .index import index_app
from .init import init_command
from .links import check_urls_command
from .maintenance import enrich_command, expire_trending_command, validate_command, verify_command

app = typer.Typer(
    name="newshub",
    help="NewsHub - static news site maintenance tools",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("generate")(generate_command)
app.add_typer(index_app, name="index", help="Build or watch the article index")
app.command("check-urls")(check_urls_command)
app.command("expire-trending")(expire_trending_command)
app.command("verify")(verify_command)
app.command("validate")(validate_command)
app.command("enrich")(enrich_command)


if __name__ == "__main__":
    app()
