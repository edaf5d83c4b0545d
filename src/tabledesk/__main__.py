from tabledesk.cli import main

main()
