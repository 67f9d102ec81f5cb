from gomermaid.cli import main

main()
