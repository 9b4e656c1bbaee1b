async def render():
    sections = ["Install", "Layouts", "Serving"]
    return [
        "<h1>Documentation</h1>",
        "<ul>",
        [f"<li>{title}</li>" for title in sections],
        "</ul>",
    ]
