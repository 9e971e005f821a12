from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line interface schema: global flags plus one
sub-command per workspace operation.
"""

import argparse

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the CodeCraft VFS CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="codecraft-vfs",
        description="Inspect and edit the CodeCraft project workspace.",
    )

    # --- Global Options ---
    p.add_argument(
        "--offline",
        action="store_true",
        help="Ignore cloud credentials and use only the local cache.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print machine-readable JSON instead of text.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Queries ---
    sub.add_parser("tree", help="Print the whole workspace as a tree.")

    ls = sub.add_parser("ls", help="List a directory.")
    ls.add_argument("path", nargs="?", default="/")

    cat = sub.add_parser("cat", help="Print the content of a file.")
    cat.add_argument("path")

    # --- Mutations ---
    touch = sub.add_parser("touch", help="Create an empty file.")
    touch.add_argument("path")

    mkdir = sub.add_parser("mkdir", help="Create a directory (and missing parents).")
    mkdir.add_argument("path")

    write = sub.add_parser("write", help="Write a file, creating it when absent.")
    write.add_argument("path")
    write.add_argument(
        "--content",
        default=None,
        help="Text to write; read from stdin when omitted.",
    )

    rm = sub.add_parser("rm", help="Delete a file or directory.")
    rm.add_argument("path")

    mv = sub.add_parser("mv", help="Move an entry into a directory.")
    mv.add_argument("source")
    mv.add_argument("dest_dir")

    rename = sub.add_parser("rename", help="Rename an entry in place.")
    rename.add_argument("path")
    rename.add_argument("new_name")

    # --- Templates and Export ---
    sub.add_parser("templates", help="List the built-in project templates.")

    scaffold = sub.add_parser("scaffold", help="Seed the workspace from a template.")
    scaffold.add_argument("template_id")
    scaffold.add_argument(
        "--replace",
        action="store_true",
        help="Replace the workspace instead of adding missing files.",
    )

    export = sub.add_parser("export", help="Dump the workspace as JSON.")
    export.add_argument(
        "--webcontainer",
        action="store_true",
        help="Use the WebContainer mount format.",
    )

    return p
