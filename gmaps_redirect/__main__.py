from gmaps_redirect.cli.main import main_cli

main_cli()
