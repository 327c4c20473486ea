"""Raw data collectors backed by the varnish command line tools"""
