import os
import sys
import argparse
from typing import List, Optional

from memoizer_config import MemoizerConfig


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="memoizer_config",
        description='generate/verify memoizer configuration file')
    parser.add_argument('--file', dest="file",
                        default="memoizer.yml", help='configuration file name')
    parser.add_argument('--create', action="store_true",
                        help='create new configuration file by standard settings')
    parser.add_argument('--verify', action="store_true",
                        help='verify existing configuration file')

    args = parser.parse_args(argv)
    path = args.file

    exit_code = 0
    if args.verify:
        if os.path.isfile(path):
            print("verifying configuration file %s..." %
                  (os.path.join(os.getcwd(), path)))
            conf = MemoizerConfig.from_yaml(path)
            if conf.error_counter.error_count == 0:
                print("No obvious errors were found. strategy=%s arity-policy=%s thread-safe=%s" %
                      (conf.strategy.value, conf.arity_policy.value, conf.thread_safe))
            else:
                # from_yaml has already printed the errors
                exit_code = 1
        else:
            print("%s does not exist." % path)
            exit_code = 1
    elif args.create:
        conf = MemoizerConfig.auto_configure()
        conf.write_as_yaml(path)
        print("memoizer configuration file is written to %s" %
              (os.path.join(os.getcwd(), path)))
    else:
        print("one of --create or --verify must be specified")
        exit_code = 1
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
