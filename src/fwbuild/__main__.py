from fwbuild.cli import main

main()
