"""DS1000Z series commands.

Modules:
    control: Global run-control commands, prefixed with ``:``.
    display: ``:DISPlay`` subsystem.
    system: ``:SYSTem`` subsystem.
"""
