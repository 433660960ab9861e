"""Command-line interface for gofile_uploader."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable, NoReturn

import click

from gofile_uploader import (
    FolderOption,
    GofileClient,
    GofileError,
    TempBuffer,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_client(token: str | None = None) -> GofileClient:
    """Create a GofileClient from the environment, overriding the token if given."""
    kwargs: dict[str, Any] = {}
    if token:
        kwargs["token"] = token
    return GofileClient.from_env(**kwargs)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _progress_callback(bar: Any) -> Callable[[int, int], None]:
    """Drive a click progress bar from (total, sent) upload callbacks."""

    def on_send(total: int, sent: int) -> None:
        bar.length = total
        bar.update(sent - bar.pos)

    return on_send


@click.group()
@click.version_option(package_name="gofile-uploader")
@click.option("--token", "-t", envvar="GOFILE_TOKEN", help="Gofile account token")
@click.option("--verbose", "-v", is_flag=True, help="Enable informational logging")
@click.pass_context
def main(ctx: click.Context, token: str | None, verbose: bool) -> None:
    """Gofile CLI - Upload and manage files on Gofile."""
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("gofile_uploader").setLevel(
        logging.INFO if verbose else logging.WARNING
    )
    # httpx logs full request URLs, which carry the account token
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
    ctx.obj = {"token": token}


@main.command()
@click.pass_obj
def server(obj: dict[str, Any]) -> None:
    """Print the server currently accepting uploads."""
    try:
        with get_client(obj["token"]) as client:
            click.echo(client.get_server())
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")


@main.command()
@click.pass_obj
def account(obj: dict[str, Any]) -> None:
    """Show account details and quotas."""
    try:
        with get_client(obj["token"]) as client:
            details = client.get_account_details()
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")

    click.echo(f"Email:       {details.email}")
    click.echo(f"Tier:        {details.tier}")
    click.echo(f"Root folder: {details.root_folder}")
    click.echo(f"Files:       {details.files_count} / {details.files_count_limit}")
    click.echo(
        f"Storage:     {_format_size(details.total_size)} / "
        + (
            str(details.total_size_limit)
            if details.total_size_limit.is_unlimited
            else _format_size(details.total_size_limit.value or 0)
        )
    )


@main.command()
@click.argument("parent_id")
@click.argument("name")
@click.pass_obj
def mkdir(obj: dict[str, Any], parent_id: str, name: str) -> None:
    """Create folder NAME inside PARENT_ID.

    Examples:

        gofile mkdir 1a2b3c4d Articles
    """
    try:
        with get_client(obj["token"]) as client:
            folder = client.create_folder(parent_id, name)
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")
    click.echo(click.style(f"Created folder: {folder.name} ({folder.id})", fg="green"))


@main.command("cp")
@click.argument("dest_id")
@click.argument("content_ids", nargs=-1, required=True)
@click.pass_obj
def copy(obj: dict[str, Any], dest_id: str, content_ids: tuple[str, ...]) -> None:
    """Copy CONTENT_IDS into folder DEST_ID."""
    try:
        with get_client(obj["token"]) as client:
            client.copy_content(dest_id, list(content_ids))
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")
    click.echo(click.style(f"Copied {len(content_ids)} item(s) to {dest_id}", fg="green"))


@main.command("rm")
@click.argument("content_ids", nargs=-1, required=True)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(obj: dict[str, Any], content_ids: tuple[str, ...], yes: bool) -> None:
    """Delete CONTENT_IDS."""
    if not yes:
        click.confirm(f"Delete {len(content_ids)} item(s)?", abort=True)
    try:
        with get_client(obj["token"]) as client:
            client.delete_content(list(content_ids))
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")
    click.echo(click.style(f"Deleted {len(content_ids)} item(s)", fg="green"))


@main.command("set-option")
@click.argument("folder_id")
@click.argument("option", type=click.Choice([o.value for o in FolderOption]))
@click.argument("value")
@click.pass_obj
def set_option(obj: dict[str, Any], folder_id: str, option: str, value: str) -> None:
    """Set OPTION of FOLDER_ID to VALUE.

    Examples:

        gofile set-option 1a2b3c4d public true

        gofile set-option 1a2b3c4d tags work,reports
    """
    try:
        with get_client(obj["token"]) as client:
            client.set_folder_option(folder_id, option, value)
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")
    click.echo(click.style(f"Set {option} on {folder_id}", fg="green"))


@main.command()
@click.argument("content_id")
@click.pass_obj
def info(obj: dict[str, Any], content_id: str) -> None:
    """List the contents of folder CONTENT_ID."""
    try:
        with get_client(obj["token"]) as client:
            content = client.get_content(content_id)
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")

    click.echo(f"{content.name} ({content.type}, code {content.code})")
    if not content.contents:
        click.echo("  (empty folder)")
        return
    for item in content.folders():
        click.echo(click.style(f"  {item.name}/", fg="blue") + f"  [{item.id}]")
    for item in content.files():
        click.echo(f"  {item.name}  ({_format_size(item.size)})  [{item.id}]")


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--folder", "-f", "folder_id", required=True, help="Destination folder ID")
@click.option("--server", "-s", default=None, help="Upload server (default: ask the API)")
@click.option(
    "--temp-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Stage upload bodies in a temp file in this directory instead of memory",
)
@click.pass_obj
def upload(
    obj: dict[str, Any],
    files: tuple[Path, ...],
    folder_id: str,
    server: str | None,
    temp_dir: Path | None,
) -> None:
    """Upload FILES to a Gofile folder.

    Examples:

        gofile upload report.pdf --folder 1a2b3c4d

        gofile upload *.mp4 -f 1a2b3c4d --temp-dir /var/tmp
    """
    temp_buffer = TempBuffer.temp_file(temp_dir) if temp_dir else None
    success_count = 0
    try:
        with get_client(obj["token"]) as client:
            server = server or client.get_server()
            for path in files:
                try:
                    with click.progressbar(length=0, label=path.name) as bar:
                        result = client.upload_path(
                            path,
                            folder_id,
                            server=server,
                            temp_buffer=temp_buffer,
                            on_send=_progress_callback(bar),
                        )
                except (GofileError, OSError) as e:
                    click.echo(click.style("✗ ", fg="red") + f"{path.name}: {e}", err=True)
                    continue
                click.echo(click.style("✓ ", fg="green") + f"{path.name} -> {result.download_page}")
                success_count += 1
    except GofileError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"{type(e).__name__}: {e}")

    total = len(files)
    if success_count == total:
        click.echo(click.style(f"\nAll {total} file(s) uploaded successfully!", fg="green"))
    else:
        click.echo(f"\n{success_count}/{total} file(s) uploaded.", err=True)
        sys.exit(1)


def _format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}" if unit != "B" else f"{size_bytes} {unit}"
        size_bytes /= 1024  # type: ignore[assignment]
    return f"{size_bytes:.1f} TB"


if __name__ == "__main__":
    main()
