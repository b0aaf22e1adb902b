from gpm.cli import run

run()
