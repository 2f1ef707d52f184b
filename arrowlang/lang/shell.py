"""Handles interactive/command-line mode for arrowlang interpreter. Uses cmd as backend."""

import cmd

from arrowlang.core.grammar import parse


class Shell(cmd.Cmd):
    """arrowlang interpreter shell."""
    intro = "arrowlang interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary arrowlang statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
            else:
                first_line = self.line_num - line.count("\n")
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, first_line)
                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the arrowlang interpreter!\n\n"
              "arrowlang is a small expression language: numbers, strings, booleans, arithmetic,\n"
              "comparisons and variables. Statements are separated by ';' and every statement\n"
              "evaluates to a value.\n\n"
              "Try it out by typing 'let x = 2'. This declares 'x'. Next, try typing\n"
              "'x = x * 3; x + 1'. This assigns 6 to 'x' and prints 7. '3 * \"ab\"' repeats a\n"
              "string and '\"a\" + 1' concatenates.")

    def do_tree(self, arg):
        """Prints the syntax tree of every statement in arg without running it."""
        with self.sess.error_handler:
            for expr in parse(arg):
                print(expr.display())

    def do_env(self, arg):
        """Prints every variable visible in the session."""
        for var, value in sorted(self.sess.env.values.items()):
            print(f"{var} = {value}")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
