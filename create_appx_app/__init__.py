"""create-appx-app -- Next.js starter project generator.

Resolves a set of preferences from command-line flags and interactive
prompts, renders the matching project tree from Jinja2 templates and installs
its dependencies with the selected package manager.
"""

__version__ = "1.0.0"
