from verso import current_path

LINKS = (("/", "Home"), ("/docs", "Docs"), ("/docs/install", "Install"))


def nav_link(href, label):
    current = ' aria-current="page"' if href == current_path() else ""
    return f'<a href="{href}"{current}>{label}</a>'


def render(children):
    links = [nav_link(href, label) for href, label in LINKS]
    return ["<nav>", links, "</nav>", "<main>", children, "</main>"]
