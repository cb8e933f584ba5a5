from macrtools.main import cli

cli()
