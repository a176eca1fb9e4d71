"""ASGI entrypoint for the site CMS API."""

from site_cms.api.app import create_app
from site_cms.containers import build_container

app = create_app(build_container())
