"""WSGI entrypoint for the Recipe Book application.

The Flask development server is intentionally not started from this module so
that deployments rely on Gunicorn. Local development can still use
``flask --app main run`` which imports the ``app`` object defined below.

Recipes live in process memory; run a single worker process so every request
sees the same collection.
"""

from recipe_book import create_app

app = create_app()


__all__ = ["app"]
