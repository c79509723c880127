from portal_console.cli import main

raise SystemExit(main())
