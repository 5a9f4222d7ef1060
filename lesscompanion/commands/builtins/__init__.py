from lesscompanion.commands.builtins.create import create
from lesscompanion.commands.builtins.render import render
from lesscompanion.commands.builtins.save import save
from lesscompanion.commands.builtins.clean import clean
from lesscompanion.commands.builtins.list_commands import list_commands
