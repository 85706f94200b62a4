"""CLI for the GitHub contents API."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .client import DEFAULT_MAX_RETRIES, GitHubClient
from .contents import ContentsService
from .errors import RequestError, ResolutionError
from .models import TYPE_FILE, RepositoryContents, RepositoryId

logger = logging.getLogger(__name__)


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_repository(value: str) -> RepositoryId:
    """Parse "owner/name" or a repository URL."""
    if "://" in value:
        return RepositoryId.create_from_url(value)
    return RepositoryId.create_from_id(value)


def find_file(
    service: ContentsService, repo: RepositoryId, path: str, ref: str | None
) -> RepositoryContents | None:
    """Return the file entry at path, or None if there is none."""
    try:
        contents = service.get_contents(repo, path, ref)
    except RequestError as e:
        if e.status == 404:
            return None
        raise
    # A directory holding a single file also lists one entry
    if (
        len(contents) == 1
        and contents[0].type == TYPE_FILE
        and contents[0].path == path.strip("/")
    ):
        return contents[0]
    raise click.ClickException(f"Not a file: {path}")


def read_content(service: ContentsService, entry: RepositoryContents) -> bytes:
    """
    Get the raw bytes of a file entry.

    Prefers download_url, which also covers files too large for inline content.
    """
    if entry.download_url:
        logger.debug("Downloading from URL: %s", entry.download_url)
        return service.client.download(entry.download_url)
    try:
        return entry.decoded_content()
    except ValueError as e:
        raise click.ClickException(str(e)) from e


class RepositoryType(click.ParamType):
    """Repository given as "owner/name" or a repository URL."""

    name = "repository"

    def convert(self, value, param, ctx):
        if isinstance(value, RepositoryId):
            return value
        try:
            return parse_repository(value)
        except ResolutionError as e:
            self.fail(str(e), param, ctx)


REPOSITORY = RepositoryType()


class ContentsGroup(click.Group):
    """Group that reports API errors as CLI errors."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except (RequestError, ResolutionError) as e:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(e)) from e


# ============ CLI Group ============

@click.group(cls=ContentsGroup)
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.option("--base-url", envvar="GITHUB_API_URL", help="API base URL (GitHub Enterprise)")
@click.option("--retries", "-r", type=int, default=DEFAULT_MAX_RETRIES, help="Retry attempts")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(
    ctx: click.Context,
    token: str | None,
    use_gh_cli: bool,
    base_url: str | None,
    retries: int,
    verbose: int,
) -> None:
    """GitHub repository contents CLI."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    client = GitHubClient(
        token=token, base_url=base_url, use_gh_cli=use_gh_cli, max_retries=retries
    )
    ctx.obj["service"] = ContentsService(client)


# ============ Read Commands ============

@cli.command()
@click.argument("repo", type=REPOSITORY)
@click.option("--ref", help="Branch, tag or commit")
@click.option("--raw", is_flag=True, help="Print decoded README text")
@click.pass_context
def readme(ctx, repo, ref, raw):
    """Show the repository README."""
    service: ContentsService = ctx.obj["service"]
    entry = service.get_readme(repo, ref)
    if raw:
        click.echo(read_content(service, entry).decode("utf-8", errors="replace"), nl=False)
        return
    click.echo(f"Name: {entry.name}")
    click.echo(f"Path: {entry.path}")
    click.echo(f"SHA:  {entry.sha}")
    click.echo(f"Size: {entry.size}")


@cli.command(name="ls")
@click.argument("repo", type=REPOSITORY)
@click.argument("path", required=False, default="")
@click.option("--ref", help="Branch, tag or commit")
@click.pass_context
def list_contents(ctx, repo, path, ref):
    """List contents at PATH (root by default)."""
    service: ContentsService = ctx.obj["service"]
    for entry in service.get_contents(repo, path, ref):
        click.echo(f"{entry.type or '-':<9} {entry.path}  {entry.sha or ''}")


@cli.command()
@click.argument("repo", type=REPOSITORY)
@click.argument("path")
@click.option("--ref", help="Branch, tag or commit")
@click.pass_context
def exists(ctx, repo, path, ref):
    """Check whether PATH exists; exit code 1 if not."""
    service: ContentsService = ctx.obj["service"]
    if service.exists(repo, path, ref):
        click.echo("yes")
    else:
        click.echo("no")
        ctx.exit(1)


@cli.command()
@click.argument("repo", type=REPOSITORY)
@click.argument("path")
@click.option("--ref", help="Branch, tag or commit")
@click.pass_context
def cat(ctx, repo, path, ref):
    """Print the decoded file at PATH."""
    service: ContentsService = ctx.obj["service"]
    entry = find_file(service, repo, path, ref)
    if entry is None:
        raise click.ClickException(f"File not found: {path}")
    click.echo(read_content(service, entry).decode("utf-8", errors="replace"), nl=False)


# ============ Write Commands ============

@cli.command()
@click.argument("repo", type=REPOSITORY)
@click.argument("path")
@click.argument("local_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--branch", help="Target branch (default branch if omitted)")
@click.pass_context
def put(ctx, repo, path, local_file, branch):
    """Create or update PATH with the content of LOCAL_FILE."""
    service: ContentsService = ctx.obj["service"]
    current = find_file(service, repo, path, branch)
    file = RepositoryContents.from_bytes(
        path, local_file.read_bytes(), sha=current.sha if current else None
    )
    if current is not None:
        result = service.update_file(repo, file, branch)
        action = "Updated"
    else:
        result = service.create_file(repo, file, branch)
        action = "Created"
    commit_sha = result.commit.sha if result.commit else None
    click.echo(f"{action} {path} ({commit_sha})")


@cli.command()
@click.argument("repo", type=REPOSITORY)
@click.argument("path")
@click.option("--branch", help="Target branch (default branch if omitted)")
@click.pass_context
def rm(ctx, repo, path, branch):
    """Delete the file at PATH."""
    service: ContentsService = ctx.obj["service"]
    current = find_file(service, repo, path, branch)
    if current is None:
        raise click.ClickException(f"File not found: {path}")
    # Without content the parameters describe a delete
    service.delete_file(repo, current.model_copy(update={"content": None}), branch)
    click.echo(f"Deleted {path}")


def main() -> None:
    """Console entry point; loads .env before parsing options."""
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
