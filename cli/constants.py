"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["tick", "run", "read", "write", "status", "clear", "exit", "help"]

BLOCK_COMMANDS = ("read", "write")

STYLE = Style.from_dict(
    {
        "prompt": "#35A7F4 bold",
        "command": "#0088ff bold",
    }
)

WELCOME_TITLE = "Dashboard Relay bench - tag-based surface replication"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "relay> "

HELP_TEXT = """Available commands:
  tick [count]                        Run replication cycles on every relay
  run <seconds>                       Let the scheduler tick relays in the background
  read <block> [surface]              Show surface text (block may be grid/block)
  write <block> [surface] <text>      Replace surface text ('\\n' in quotes = line break)
  status                              Show relays, tags and message count
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  write Cockpit 1 'Fuel: 80%\\nO2: 95%'
  tick
  read Ship2/Screen1"""
