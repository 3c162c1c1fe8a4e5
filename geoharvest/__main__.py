from geoharvest.cli import main

raise SystemExit(main())
