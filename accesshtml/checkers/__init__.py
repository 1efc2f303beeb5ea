"""Read-only site checkers: links, meta tags, GTM, unused files and file sizes."""
