from tictactoe_mcp.cli import main

raise SystemExit(main())
