from rill.main import main

main()
