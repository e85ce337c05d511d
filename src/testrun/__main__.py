from testrun.cli.main import cli

cli()
