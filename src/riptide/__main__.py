from riptide.cli import main


raise SystemExit(main())
