from sum_mcp.cli import main

main()
