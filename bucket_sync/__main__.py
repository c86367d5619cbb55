from bucket_sync.cli import main

raise SystemExit(main())
