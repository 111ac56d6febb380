from rich.pretty import pprint

from argtree import *

wsm = (
    CommandNode(
        "wsm",
        "Command line workspace multiplexer, add workspaces to list and switch between them using fzf and tmux",
    )
    .add_subcommand(
        CommandNode("select", "Select a workspace in fzf and switch to tmux session (create + switch)")
        .add_arg("p", "print", ArgKind.FLAG, "creates tmux workspace and prints name instead of switching")
    )
    .add_subcommand(
        CommandNode("add", "Add a workspace to fzf")
        .add_arg("n", "name", ArgKind.VALUE, "Set specific custom name for the workspace")
    )
    .add_subcommand(CommandNode("remove", "remove workspace from fzf"))
    .add_subcommand(CommandNode("ls", "list all workspaces added"))
)


if __name__ == '__main__':
    command = invoke(wsm)
    match command.route:
        case ("add",) | ("remove",):
            pprint({"route": command.route, "workspace": command.positional_string or ".", "name": command.get_value("name")})
        case ("select",) | ("ls",):
            pprint(command)
        case _:
            print(wsm.help(command.path))
