"""Checks for clusters whose nodes run the containerd runtime."""