from tinyfeed.core.config import settings
from tinyfeed.formats.escape import escape_html
from tinyfeed.pages.layout import DEFAULT_DESCRIPTION, base_html



def landing_page() -> str:
    content = f"""
    <div class="landing">
      <h1 class="landing-title">{escape_html(settings.APP_NAME)}</h1>
      <p class="landing-tagline">{DEFAULT_DESCRIPTION}</p>

      <div id="my-feed-banner" class="my-feed-banner">
        <a id="my-feed-link" href="#">go to my feed →</a>
      </div>

      <div class="landing-create">
        <button id="create-btn" class="btn btn-primary">create</button>
      </div>

      <p class="landing-import">
        already have one? <a href="/import">restore access →</a>
      </p>
    </div>
    """
    return base_html(content, script="landing.js")
