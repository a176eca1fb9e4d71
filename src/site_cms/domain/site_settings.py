"""Site-wide settings shown on the public homepage."""

HOMEPAGE_SETTINGS_KEY = "homepage-hero"
DEFAULT_FEATURED_PROJECTS_LIMIT = 3

DEFAULT_HERO: dict[str, object] = {
    "title": "Building the Future of Renewable Energy Infrastructure",
    "subtitle": (
        "Expert precast concrete solutions for utility-scale battery storage, "
        "solar installations, and critical infrastructure projects."
    ),
    "primaryButton": {
        "enabled": True,
        "text": "View Our Projects",
        "link": "/projects",
        "backgroundColor": "#ffffff",
        "textColor": "#1e40af",
    },
    "secondaryButton": {
        "enabled": True,
        "text": "Get in Touch",
        "link": "/contact",
        "backgroundColor": "transparent",
        "textColor": "#ffffff",
    },
    "backgroundImage": "",
    "backgroundVideo": "",
    "backgroundType": "color",
    "backgroundColor": "#1e40af",
    "imageSettings": {"opacity": 30, "position": "center", "scale": 100},
}


def default_homepage_settings() -> dict[str, object]:
    return {
        "featuredProjectsLimit": DEFAULT_FEATURED_PROJECTS_LIMIT,
        "hero": merge_with_defaults({}, DEFAULT_HERO),
    }


def merge_with_defaults(
    values: dict[str, object], defaults: dict[str, object]
) -> dict[str, object]:
    """Fill missing or null keys from `defaults`, recursing into nested groups.

    Keys unknown to `defaults` are dropped.
    """
    merged: dict[str, object] = {}
    for key, default in defaults.items():
        value = values.get(key)
        if isinstance(default, dict):
            nested = value if isinstance(value, dict) else {}
            merged[key] = merge_with_defaults(nested, default)
        else:
            merged[key] = default if value is None else value
    return merged
