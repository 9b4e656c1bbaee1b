def render():
    return "<h1>Verso</h1><p>Pre-rendered pages from a directory of modules.</p>"
