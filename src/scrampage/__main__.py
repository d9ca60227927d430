from scrampage.main import main

main()
