from bumper import cli

cli.entrypoint()
