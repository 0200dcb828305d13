from serpscope.cli import main

raise SystemExit(main())
