from ffhost.cli import main

main()
