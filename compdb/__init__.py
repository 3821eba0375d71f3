"""
compdb: Load and query JSON compilation databases.

A compilation database (``compile_commands.json``) records, for every source
file of a build, the directory and the compiler invocation used to build it.
compdb lets you:
- Look up the compile commands for any source file
- List every indexed file or every command
- See how an escaped "command" string splits into arguments

Usage:
    from compdb.core.database import JSONCompilationDatabase

    database = JSONCompilationDatabase.load_from_file("build/compile_commands.json")
    for command in database.get_compile_commands("/src/main.cpp"):
        print(command.directory, command.invocation)
"""

__version__ = "0.1.0"
