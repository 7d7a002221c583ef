# Licensed under the MIT License
# https://github.com/craigahobbs/claudesh/blob/main/LICENSE

"""
claudesh command-line script main module
"""

import shutil
import subprocess
import sys

import schema_markdown


# The claudesh version
CLAUDESH_VERSION = '0.1.0'

# The claude command name, found on the search path
CLAUDE_COMMAND = 'claude'


def main(argv=None, version=CLAUDESH_VERSION):
    """
    claudesh command-line script main entry point
    """

    # Command line arguments
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)

        # Show the version?
        if args['version']:
            print(version)
            return

        # Load the prompt script and pass it to claude
        prompt = load_prompt(args['script'])
        run_claude(args['flags'], prompt)

    # claude has already written its own error output or was interrupted
    except (SubprocessExitError, KeyboardInterrupt):
        sys.exit(1)
    except ClaudeshError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)


def parse_args(argv):
    """
    Classify the command line arguments. The last argument is always the prompt script path and all
    preceding arguments are claude flags, regardless of their syntax.
    """

    if not argv:
        raise UsageError('missing script argument')

    # Version query?
    if argv[0] in ('--version', '-v'):
        args = {'version': True, 'flags': []}
    else:
        args = {'version': False, 'script': argv[-1], 'flags': list(argv[:-1])}

    # Validate the arguments
    try:
        return schema_markdown.validate_type(CLAUDESH_TYPES, 'ClaudeshArgs', args)
    except schema_markdown.ValidationError as exc:
        raise UsageError(str(exc)) from exc


def load_prompt(script_path):
    """
    Read a prompt script file and return its prompt bytes. The bytes are not decoded.
    """

    try:
        with open(script_path, 'rb') as script_file:
            script_bytes = script_file.read()
    except OSError as exc:
        raise FileError(str(exc)) from exc

    return strip_shebang(script_bytes)


# Helper to remove a prompt script's shebang line, if any
def strip_shebang(script_bytes):
    lines = script_bytes.split(b'\n')
    if lines[0].startswith(b'#!'):
        del lines[0]
    return b'\n'.join(lines)


def run_claude(flags, prompt):
    """
    Run claude with the prompt on its standard input. claude's standard output and standard error are
    inherited from this process.
    """

    # Locate claude
    claude_path = shutil.which(CLAUDE_COMMAND)
    if claude_path is None:
        raise LaunchError(f'"{CLAUDE_COMMAND}" not found on PATH')

    # Run claude and wait for it to exit
    try:
        result = subprocess.run([claude_path, '-p', *flags], input=prompt, check=False)
    except OSError as exc:
        raise LaunchError(str(exc)) from exc
    if result.returncode != 0:
        raise SubprocessExitError(result.returncode)


class ClaudeshError(Exception):
    pass


class UsageError(ClaudeshError):
    pass


class FileError(ClaudeshError):
    pass


class LaunchError(ClaudeshError):
    pass


class SubprocessExitError(ClaudeshError):
    def __init__(self, returncode):
        super().__init__(f'"{CLAUDE_COMMAND}" exited with status {returncode}')
        self.returncode = returncode


# The claudesh command line arguments model
CLAUDESH_SMD = '''\
# The classified claudesh command line arguments
struct ClaudeshArgs

    # If true, print the claudesh version
    bool version

    # The prompt script path
    optional string(len > 0) script

    # The flags passed through to claude, in command line order
    string[] flags
'''
CLAUDESH_TYPES = schema_markdown.parse_schema_markdown(CLAUDESH_SMD)
