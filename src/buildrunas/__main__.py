from buildrunas.cli import main

raise SystemExit(main())
