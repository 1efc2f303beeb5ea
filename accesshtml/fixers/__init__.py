"""Per-rule accessibility fixers."""


def _register_all() -> None:
    """Import all fixer modules to trigger @register_fixer.

    Called lazily by the pipeline to avoid circular imports.  Execution
    order comes from ``pipeline.FIXER_ORDER``, not from import order.
    """
    from accesshtml.fixers import lang  # noqa: F401
    from accesshtml.fixers import alt  # noqa: F401
    from accesshtml.fixers import roles  # noqa: F401
    from accesshtml.fixers import aria  # noqa: F401
    from accesshtml.fixers import forms  # noqa: F401
    from accesshtml.fixers import controls  # noqa: F401
    from accesshtml.fixers import landmarks  # noqa: F401
    from accesshtml.fixers import description_lists  # noqa: F401
    from accesshtml.fixers import headings  # noqa: F401
