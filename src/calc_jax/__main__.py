from .repl import main

raise SystemExit(main())
