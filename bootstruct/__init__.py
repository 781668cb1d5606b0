"""
# Boot image codec.

An Android boot image is a container: a header followed by the kernel, the
ramdisk and some optional components (second stage, device tree, ...), each
one starting at a page boundary.

This package doesn't know the header layouts, these are provided by the
caller as offsets and sizes; what it does is

 1. compute the padding between the components (alignment),
 2. encode/decode the bit packed os_version and os_patch_level (version),
 3. compute the SHA-1 id of the components stored in the header (common.digest),
 4. place components into an image under construction (writer) and cut them
    out of an existing image delegating the content to external tools (slice).

"""
