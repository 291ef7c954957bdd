from note_universe.main import main

raise SystemExit(main())
