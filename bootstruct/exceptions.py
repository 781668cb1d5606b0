class BootStructException(Exception):
    '''Base class to extend in order to throw exception in bootstruct.

    It takes a message and optionally the chain of components (kernel,
    ramdisk, ...) that the failure travelled through.
    '''

    def __init__(self, message='', chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)


class InvalidArgumentException(BootStructException, ValueError):
    pass


class IOException(BootStructException, OSError):
    pass


class OverflowException(BootStructException, OverflowError):
    '''A component doesn't fit in the 32-bit length field.'''
    pass


class HashMismatchException(BootStructException):
    '''Data integrity violation: it must reach the top level caller untouched.'''
    pass


class ExternalToolException(BootStructException):
    '''A child process exited with a non-zero status or is missing.'''

    def __init__(self, message='', returncode=None, stderr=b'', chain=None):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, chain=chain)
