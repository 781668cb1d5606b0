from enum import Enum


class ComponentKind(Enum):
    '''The logical content of a slice, it decides the unpacking pipeline'''
    KERNEL  = 'kernel'
    RAMDISK = 'ramdisk'
    DTB     = 'dtb'
