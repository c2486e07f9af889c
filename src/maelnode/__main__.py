from maelnode.main import main

raise SystemExit(main())
