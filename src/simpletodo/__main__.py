from simpletodo.cli.main import main

main()
