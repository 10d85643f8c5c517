"""
Branding extension

Contributes the "Built with hookhub" link as an icon, shown on self-hosted
deployments only.
"""

BRANDING_URL = "https://github.com/hookhub/hookhub"


def branding_link(label: str = "Built with hookhub") -> dict:
    """Describe the branding link for the host to render"""
    return {"label": label, "href": BRANDING_URL}


def setup(registry):
    registry.register({
        "id": "branding",
        "kind": "icon",
        "name": "Branding",
        "description": "Link back to the project",
        "value": branding_link,
        "priority": 100,
        "deployments": ["community", "enterprise"],
    })
