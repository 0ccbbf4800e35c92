from textwiki.main import main

main()
