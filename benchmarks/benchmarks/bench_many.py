from combparse.Char import char, digit
from combparse.Combinators import chainl1, sep_by
from combparse.Prim import many, run_parser


class TimeMany:
    def setup(self):
        self.parser = many(char("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        run_parser(self.parser, self.small)

    def time_many_medium(self):
        run_parser(self.parser, self.medium)

    def time_many_large(self):
        run_parser(self.parser, self.large)


class TimeTrampolined:
    def setup(self):
        self.csv = sep_by(digit(), char(","))
        self.sum = chainl1(digit().map(int), char("+").map(lambda _: lambda x, y: x + y))
        self.csv_input = ",".join(["1"] * 50000)
        self.sum_input = "+".join(["1"] * 50000)

    def time_sep_by(self):
        run_parser(self.csv, self.csv_input)

    def time_chainl1(self):
        run_parser(self.sum, self.sum_input)
