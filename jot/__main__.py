from jot.cli.main import main

main()
