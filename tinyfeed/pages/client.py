"""
Pages whose content lives entirely in the browser's localStorage
(own feed bookmark, contacts). The server only ships the shell; the
scripts read public data through ``/api/feed/{id}``.
"""
from tinyfeed.pages.layout import base_html, page_title



def home_page() -> str:
    content = """
    <header class="header">
      <h1 class="feed-name">home</h1>
    </header>

    <section class="posts" id="posts">
      <p class="loading">loading</p>
    </section>

    <footer class="footer">
      <span id="feed-count">loading...</span>
    </footer>
    """
    return base_html(content, title=page_title("home"), script="home.js")


def contacts_page() -> str:
    content = """
    <header class="header">
      <div class="header-top">
        <h1 class="feed-name">contacts</h1>
        <div class="header-actions">
          <button id="export-btn" class="btn hidden">export</button>
          <button id="import-btn" class="btn">import</button>
          <input type="file" id="import-file" accept=".json" class="hidden">
        </div>
      </div>
    </header>

    <section id="contacts-list">
      <p class="loading">loading</p>
    </section>

    <form id="add-form" class="add-form">
      <input type="text" id="add-input" class="add-input" placeholder="paste feed url...">
      <button type="submit" class="btn btn-primary">add</button>
    </form>
    """
    return base_html(content, title=page_title("contacts"), script="contacts.js")


def restore_page() -> str:
    content = """
    <header class="header">
      <div class="header-top">
        <h1 class="feed-name">restore access</h1>
        <div class="header-actions">
          <a href="/" class="btn">← back</a>
        </div>
      </div>
      <p class="feed-about">paste your private URL to restore access to your feed</p>
    </header>

    <div id="existing-feed" class="notice hidden">
      <p>you already have a feed saved in this browser:</p>
      <a id="existing-feed-link" href="#">go to my feed →</a>
    </div>

    <form id="import-form">
      <div class="edit-field">
        <label for="import-input">private url</label>
        <input type="text" id="import-input" placeholder="https://.../f/abc123#s=...">
      </div>
      <div class="edit-actions">
        <button type="submit" class="btn btn-primary">restore</button>
      </div>
    </form>
    """
    return base_html(content, title=page_title("restore access"), script="import.js")
