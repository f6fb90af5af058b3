# main.py
import logging
from pathlib import Path
import click

from filepane.loader import DirectoryLoader
from filepane.renderer import Renderer
from filepane.ui.textuals import ExplorerApp

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False), default='.')
@click.option("-a", "--all", "show_hidden", is_flag=True,
              help="Include hidden files and folders.")
@click.option("-g", "--ignore-gitignore", is_flag=True,
              help="Show entries matched by .gitignore.")
@click.option("--print", "print_only", is_flag=True,
              help="Print the tree and exit instead of opening the explorer.")
@click.option("--expand-all", is_flag=True,
              help="Expand every folder when printing the tree.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default="WARNING", show_default=True, envvar="FILEPANE_LOG_LEVEL",
              help="Logging verbosity.")
def cli(path, show_hidden, ignore_gitignore, print_only, expand_all, log_level):
    """
    Browse a directory in an interactive file explorer.

    Select, open, rename, create and delete entries from the keyboard.
    Changes only live in the explorer; nothing is written to disk.
    The final tree is printed when the explorer closes.
    """
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, log_level.upper()))

    root_path = Path(path).resolve()
    loader = DirectoryLoader(ignore_hidden=not show_hidden, respect_gitignore=not ignore_gitignore)
    root = loader.load(str(root_path))

    if print_only:
        click.echo(Renderer(root).render_tree(expand_all=expand_all))
        return

    app = ExplorerApp(root)
    app.run()

    click.echo(Renderer(root, active=app.session.selection.current).render_tree(expand_all=expand_all))
    if app.session.tabs.open_tabs:
        names = ", ".join(node.name for node in app.session.tabs.open_tabs)
        click.secho(f"[Open tabs: {names}]", err=True)


if __name__ == "__main__":
    cli()
