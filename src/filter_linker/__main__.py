from filter_linker.cli import app

app()
