from zidian.cli import main

main()
