# ABOUTME: Jinja2 rendering of the subscription confirmation email.
# ABOUTME: Produces matching HTML and plain-text bodies around one confirmation link.

from jinja2 import Environment, FileSystemLoader

from newsletter_desk.config import Settings, get_settings

CONFIRMATION_HTML_TEMPLATE = "confirmation_email.html"
CONFIRMATION_TXT_TEMPLATE = "confirmation_email.txt"


class ConfirmationEmailRenderer:
    """Renders confirmation emails from the configured templates directory."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._jinja_env: Environment | None = None

    @property
    def jinja_env(self) -> Environment:
        """Lazy-initialized Jinja2 environment."""
        if self._jinja_env is None:
            self._jinja_env = Environment(
                loader=FileSystemLoader(str(self.settings.templates_dir)),
                autoescape=True,
            )
        return self._jinja_env

    def render(self, confirmation_link: str) -> tuple[str, str]:
        """Return (html_body, text_body) for a confirmation link."""
        context = {"confirmation_link": confirmation_link}
        html_body = self.jinja_env.get_template(CONFIRMATION_HTML_TEMPLATE).render(**context)
        text_body = self.jinja_env.get_template(CONFIRMATION_TXT_TEMPLATE).render(**context)
        return html_body, text_body
