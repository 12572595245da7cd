from typing import List


# collects validation messages so that every problem in a configuration
# file is reported at once
class ErrorCounter:
    def __init__(self):
        self.error_count = 0
        self.error_messages: List[str] = []

    def record(self, message: str):
        self.error_count += 1
        self.error_messages.append(message)

    def record_at(self, line: int, message: str):
        self.record("line %d: %s" % (line, message))

    def print_errors(self):
        print("total %d errors are found." % (self.error_count, ))
        for message in self.error_messages:
            print(message)
