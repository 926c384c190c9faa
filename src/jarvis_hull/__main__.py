from jarvis_hull.cli import main

raise SystemExit(main())
