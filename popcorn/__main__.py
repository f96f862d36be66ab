from popcorn.main import main

main()
