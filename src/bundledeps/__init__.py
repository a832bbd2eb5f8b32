# @mindmaze_header@
"""
The bundledeps python package

bundledeps computes the host distribution packages needed by a bundle of
foreign native binaries (for example an unpacked proprietary rpm):
 * file_utils: find the native binaries of the bundle
 * ldd, scanner, library_set: collect their external shared libraries
 * syspkg_manager*, rpmfind, resolver: map libraries to packages
 * package_set: aggregate the result and write the requirement list

Commands are not presented, they live in bundledeps.__main__.
"""
