def render(children, pathname):
    return (
        "<!doctype html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="utf-8">'
        f"<title>Verso docs {pathname}</title>"
        '<link rel="stylesheet" href="/styles/site.css">'
        "</head>"
        f"<body>{children}</body>"
        "</html>"
    )
