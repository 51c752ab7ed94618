from tinyfeed.pages.layout import base_html, page_title



def not_found_page() -> str:
    content = """
    <div class="landing">
      <h1 class="landing-title">404</h1>
      <p class="landing-tagline">feed not found</p>

      <div class="landing-create">
        <a href="/" class="btn">← back home</a>
      </div>
    </div>
    """
    return base_html(content, title=page_title("not found"))
