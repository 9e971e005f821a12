from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging setup, configuration loading,
workspace bootstrap, execution of one command through the store, and a
final flush of the synchronization pipeline before the process exits.
"""

import json
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from codecraft_vfs.core.services.session import WorkspaceSession, open_workspace
from codecraft_vfs.core.vfs.render import list_directory, render_tree, to_webcontainer
from codecraft_vfs.domain.config import load_config
from codecraft_vfs.domain.errors import WorkspaceError
from codecraft_vfs.domain.templates import TEMPLATES, build_tree_from_template, get_template
from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode, NodeKind, node_to_dict
from codecraft_vfs.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from codecraft_vfs.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stdin: Stream used by `write` when no --content is given.

    Returns:
        int: Process exit code (0 success, 1 rejected operation, 2 usage error).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    configure_logging(LoggingConfig.from_settings(config, debug=args.debug))
    try:
        return _run(args, config, stdin or sys.stdin)
    finally:
        shutdown_logging()


def _run(args: Any, config: Dict[str, Any], stdin: TextIO) -> int:
    """Bootstrap the workspace, execute one command and flush the pipeline."""
    try:
        session = open_workspace(config, offline=args.offline)
    except WorkspaceError as e:
        logger.critical(f"Workspace bootstrap failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        output = _COMMANDS[args.command](session, args, stdin)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        session.close(flush=True)
        return 130
    except WorkspaceError as e:
        logger.debug(f"Command '{args.command}' rejected: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        session.close(flush=True)
        return 1

    if not session.close(flush=True):
        print("WARNING: Saved locally, cloud sync failed.", file=sys.stderr)

    logger.info(f"CLI: Command '{args.command}' completed.")

    _print_output(output, args.json_output)
    return 0

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_tree(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    tree = session.store.snapshot()
    assert tree is not None
    return ["/"] + render_tree(tree)


def _cmd_ls(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    node = session.store.get_node(args.path)
    if node is None:
        raise WorkspaceError(f"Path not found: {args.path}", path=args.path)
    if isinstance(node, FileNode):
        return [args.path.rstrip("/").split("/")[-1]]
    return list_directory(node)


def _cmd_cat(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    content = session.store.read_node(args.path)
    if content is None:
        raise WorkspaceError(f"Not a file: {args.path}", path=args.path)
    return content


def _cmd_touch(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    session.store.create_node(args.path, NodeKind.FILE)
    return f"Created file {args.path}"


def _cmd_mkdir(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    session.store.create_node(args.path, NodeKind.DIRECTORY)
    return f"Created directory {args.path}"


def _cmd_write(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    content = args.content if args.content is not None else stdin.read()
    if session.store.get_node(args.path) is None:
        session.store.create_node(args.path, NodeKind.FILE, content)
    else:
        session.store.update_node(args.path, content)
    return f"Wrote {len(content)} characters to {args.path}"


def _cmd_rm(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    session.store.delete_node(args.path)
    return f"Deleted {args.path}"


def _cmd_mv(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    session.store.move_node(args.source, args.dest_dir)
    return f"Moved {args.source} into {args.dest_dir}"


def _cmd_rename(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    session.store.rename_node(args.path, args.new_name)
    return f"Renamed {args.path} to {args.new_name}"


def _cmd_templates(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    return [f"{t.id}: {t.name} - {t.description}" for t in TEMPLATES]


def _cmd_scaffold(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    template = get_template(args.template_id)
    if template is None:
        raise WorkspaceError(f"Unknown template: {args.template_id}")
    if args.replace:
        session.store.replace_fs(build_tree_from_template(template.files))
    else:
        session.store.scaffold_project(template.files)
    return f"Applied template {template.id}"


def _cmd_export(session: WorkspaceSession, args: Any, stdin: TextIO) -> Any:
    tree = session.store.snapshot()
    assert isinstance(tree, DirectoryNode)
    if args.webcontainer:
        return to_webcontainer(tree)["directory"]
    return node_to_dict(tree)


_COMMANDS: Dict[str, Callable[[WorkspaceSession, Any, TextIO], Any]] = {
    "tree": _cmd_tree,
    "ls": _cmd_ls,
    "cat": _cmd_cat,
    "touch": _cmd_touch,
    "mkdir": _cmd_mkdir,
    "write": _cmd_write,
    "rm": _cmd_rm,
    "mv": _cmd_mv,
    "rename": _cmd_rename,
    "templates": _cmd_templates,
    "scaffold": _cmd_scaffold,
    "export": _cmd_export,
}

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_output(output: Any, as_json: bool) -> None:
    """Print a command result as JSON or as plain text."""
    if as_json:
        print(json.dumps(output, ensure_ascii=False, indent=2))
    elif isinstance(output, list):
        print("\n".join(str(line) for line in output))
    elif isinstance(output, dict):
        print(json.dumps(output, ensure_ascii=False, indent=2))
    else:
        print(output)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
