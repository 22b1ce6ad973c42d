"""Infrastructure adapters.

Why:
- They implement the `core.interfaces` contracts (engine REST, on-disk
  artifacts, snapshots, Jinja2, JSON).
- The Core imports nothing from here; only the CLI wires them together.
"""
