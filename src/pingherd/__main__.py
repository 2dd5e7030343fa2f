from pingherd.cli import main

main()
