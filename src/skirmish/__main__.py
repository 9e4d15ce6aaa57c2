from skirmish.main import main

main()
