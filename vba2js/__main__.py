from vba2js.translator.cli import main

raise SystemExit(main())
