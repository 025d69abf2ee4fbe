from flavors_api.cli import main

main()
