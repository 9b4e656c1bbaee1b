raise RuntimeError("private modules are not pages")
