"""
AndroidSdkKit - Android SDK provisioning for builds.

Locates (or downloads) an Android SDK for a build, persists its location in
local.properties, and installs the SDK packages the build is missing.
"""
