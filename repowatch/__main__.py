from repowatch.cli.app import main

main()
