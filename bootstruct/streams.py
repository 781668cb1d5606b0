import io
import logging

from . import settings
from .exceptions import IOException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path objects to
    uniform their access: the file is opened only inside a "with" block
    and it's always closed on exit.

        with Stream('boot.img') as stream:
            stream.seek(40)
            data = stream.read_exactly(4)
    '''
    def __init__(self, obj):
        self._type = type(obj)
        self.source = obj
        self.obj = None
        self.history = []

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __enter__(self):
        init_method_name = 'init_%s' % self._type.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

        init_method()

        return self

    def __exit__(self, *exc):
        self.obj.close()
        self.obj = None

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.source)
        try:
            self.obj = open(self.source, 'rb')
        except OSError as e:
            raise IOException(f'cannot open \'{self.source}\': {e}') from e

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.source)

    def size(self) -> int:
        self.save()
        size = self.obj.seek(0, io.SEEK_END)
        self.restore()

        return size

    def read_exactly(self, size: int) -> bytes:
        '''Read size bytes or fail: a short read means a truncated source.'''
        offset = self.obj.tell()
        try:
            data = self.obj.read(size)
        except OSError as e:
            raise IOException(f'read of {size} bytes at offset {offset} failed: {e}') from e

        if len(data) != size:
            raise IOException(f'expected {size} bytes at offset {offset}, got {len(data)}')

        return data

    def iter_chunks(self, chunk_size: int):
        '''Fails immediately on a non positive chunk_size, a zero read would end the loop.'''
        chunk_size = settings.check_chunk_size(chunk_size)

        return self._iter_chunks(chunk_size)

    def _iter_chunks(self, chunk_size: int):
        while True:
            try:
                data = self.obj.read(chunk_size)
            except OSError as e:
                raise IOException(f'read failed: {e}') from e
            if not data:
                break
            yield data

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)


class OutputBuffer(object):
    '''Growable buffer where an image is assembled; position is the write cursor.'''

    def __init__(self, initial=b''):
        self._buffer = io.BytesIO()
        self._buffer.write(initial)

    def __len__(self):
        return len(self._buffer.getbuffer())

    @property
    def position(self) -> int:
        return self._buffer.tell()

    def seek(self, offset: int):
        self._buffer.seek(offset)
        return self

    def write(self, data: bytes) -> int:
        return self._buffer.write(data)

    def truncate(self, position: int):
        '''Drop everything from position on and move the cursor there.'''
        self._buffer.seek(position)
        self._buffer.truncate()
        return self

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()

    def save(self, path):
        logger.info(f'writing {len(self)} bytes to \'{path}\'')
        try:
            with open(path, 'wb') as f:
                f.write(self.getvalue())
        except OSError as e:
            raise IOException(f'cannot write \'{path}\': {e}') from e
