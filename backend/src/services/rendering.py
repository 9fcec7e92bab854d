"""Server-side rendering of the tag collection fragment."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from ..constants import MSG_MANAGE_POSTS, MSG_NO_TAGS
from ..models.term import TagListing
from ..utils.localization import Translator

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_templates() -> Jinja2Templates:
    """Create the template loader for pages and fragments."""
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


class TagCollectionRenderer:
    """Renders a weighted listing as the ``tag_collection`` HTML fragment."""

    def __init__(self, templates: Jinja2Templates, translator: Translator, posts_url: str = "/admin/posts"):
        self.templates = templates
        self.translator = translator
        self.posts_url = posts_url

    def __call__(self, listing: TagListing) -> str:
        template = self.templates.get_template("tag_collection.html")
        return template.render(
            listing=listing,
            posts_url=self.posts_url,
            empty_message=self.translator.translate(MSG_NO_TAGS),
            manage_title=lambda name: self.translator.translate(MSG_MANAGE_POSTS, {"name": name})
        )
