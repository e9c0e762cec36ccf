from changelog_py.cli import main

main()
