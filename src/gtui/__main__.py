from gtui.cli.cli import main

main()
