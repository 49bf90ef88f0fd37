from setdb.cli import main

raise SystemExit(main())
