from bucket_mirror.main import cli

cli()
