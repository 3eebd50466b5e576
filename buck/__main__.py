from buck.cli.app import main

main()
