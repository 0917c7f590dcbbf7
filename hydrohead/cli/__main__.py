from hydrohead.cli.main import main

main()
