"""Handles interactive/command-line mode for the treelox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """treelox interpreter shell."""
    intro = "treelox :: tree-walking Lox interpreter\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def onecmd(self, line):
        """Only a bare 'exit' or 'help' is a shell command. Anything else, including every line of an unfinished block,
        is treelox source (so `exit = exit + 1;` assigns rather than quits).
        """
        command, arg, line = self.parseline(line)

        if command == "EOF":
            return super().onecmd(line)
        if self._tmp_line or (arg and command in ("exit", "help")):
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary treelox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.run(source)

    def do_help(self, arg):
        """Prints a short intro rather than command docs."""
        print("Welcome to the treelox interpreter!\n\n"
              "treelox runs a small C-like scripting language: numbers, strings, booleans and nil, \n"
              "arithmetic and comparison operators, 'and'/'or', 'var' declarations, blocks, \n"
              "'if', 'while' and 'for'. Variables declared here live until you exit.\n\n"
              "Try it out by typing 'var x = 40 + 2;', then 'print x;'. Blocks may span several \n"
              "lines: the prompt changes to '. ' until every '{' is closed.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self._tmp_line += "\n"
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
