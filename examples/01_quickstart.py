#!/usr/bin/env python3
"""Example: Quickstart for ambit

Minimal working example: parse a configuration, then resolve it for two
different machines to see how match expressions pick per-system paths.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install ambit
"""
from __future__ import annotations

import ambit

AMBIT_SOURCE = '''
# Editors and terminals
.config/[nvim/init.vim, kitty/[kitty.conf, theme.conf]];

# Only X11 systems get .Xresources
{os(linux): .Xresources};

# Same destination, different source per OS
{os(linux): .emacs, os(macos): .config/nvim/init.vim, default: .vimrc} => .vimrc;

# Host-specific git identity
git/{host(work-laptop): work, default: personal}.gitconfig => .gitconfig;
'''


def main() -> None:
    print(f"ambit version: {ambit.__version__}")

    # Step 1: Parse configuration text into an AST
    document = ambit.parse(AMBIT_SOURCE)
    print(f"Parsed {len(document)} statements")

    # Step 2: Resolve for a Linux workstation
    linux = ambit.EvaluationContext(os_id="linux", hostname="work-laptop")
    print("\nlinux / work-laptop:")
    for link in ambit.resolve(document, linux):
        print(f"  {link}")

    # Step 3: Resolve the same document for a Mac
    mac = ambit.EvaluationContext(os_id="macos", hostname="home-mac")
    print("\nmacos / home-mac:")
    for link in ambit.resolve(document, mac):
        print(f"  {link}")


if __name__ == "__main__":
    main()
