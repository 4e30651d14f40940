from .update import main

main()
