#!/usr/bin/env python3
"""Example: Link planning for ambit

Builds a throwaway dotfile repository and home directory, then runs a
dry-run sync, a real sync, a second (no-op) sync and a clean.

Usage:
    python examples/02_link_planning.py

Requirements:
    pip install ambit
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from ambit import AmbitConfig, EvaluationContext
from ambit.linker import AmbitPaths, LinkPlanner

AMBIT_SOURCE = '''
.config/[nvim/init.vim, kitty/kitty.conf];
{os(linux): .Xresources, default: .Xdefaults};
'''


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        repo, home = root / "repo", root / "home"
        for name in (".config/nvim/init.vim", ".config/kitty/kitty.conf", ".Xresources"):
            (repo / name).parent.mkdir(parents=True, exist_ok=True)
            (repo / name).write_text("# dotfile\n")
        home.mkdir()

        paths = AmbitPaths(home=home, repo=repo, config=repo / "config.ambit")
        links = AmbitConfig(AMBIT_SOURCE).links(EvaluationContext("linux", "demo"))

        # Step 1: See what would happen
        print(LinkPlanner(paths, dry_run=True).sync(links).summary())

        # Step 2: Create the links
        print(LinkPlanner(paths).sync(links).summary())

        # Step 3: Running again changes nothing
        print(LinkPlanner(paths).sync(links).summary())

        # Step 4: Remove them
        print(LinkPlanner(paths).clean(links).summary())


if __name__ == "__main__":
    main()
