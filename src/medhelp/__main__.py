from medhelp.cli import main

main()
